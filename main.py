# main.py
import argparse
import json

from rr_sim.app.build import App, build
from rr_sim.app.events import SaveRequested, Tick, ToggleRunning
from rr_sim.domain.mechanics.mechanics_projector import bounding_box


def run(ticks: int, cfg: dict | None = None, *, save: bool = False, use_logging: bool = True):
    app = build(cfg or {}, use_logging=use_logging)
    dt_ms = app.model.sim.tick_ms

    app.send(ToggleRunning(t=0.0))
    for i in range(1, ticks + 1):
        app.send(Tick(t=i * dt_ms / 1000.0, delta_ms=dt_ms))
        if not app.state.running:  # derailed
            break
    if save:
        app.send(SaveRequested(t=app.kernel.now))
    return app


def report(app: App) -> list[str]:
    """Plain-text picture of the final state: layout extent, trains and their cars."""
    st = app.state
    frames = app.mechanics.frames(st.layout)
    x0, y0, x1, y1 = bounding_box(frames)
    lines = [f"layout: {len(frames)} nodes in ({x0:.1f}, {y0:.1f}) .. ({x1:.1f}, {y1:.1f}) m"]
    for tr in st.trains:
        loc = tr.location
        where = "derailed" if loc is None else f"{loc.edge} @ {loc.pos:.2f} m ({loc.orientation.value})"
        lines.append(f"{tr.name}: {where}, t={st.t:.2f} s")
        for i, car in enumerate(app.mechanics.car_positions(tr, st.layout, st.switch_states, frames)):
            lines.append(
                f"  car {i}: ({car.p1.x:.2f}, {car.p1.y:.2f}) -> ({car.p2.x:.2f}, {car.p2.y:.2f})"
            )
    return lines


def main(argv=None):
    p = argparse.ArgumentParser(description="Run the railroad simulation headless.")
    p.add_argument("--ticks", type=int, default=600, help="host frames to simulate")
    p.add_argument("--config", help="scenario JSON file")
    p.add_argument("--save", action="store_true", help="write the final state to save_path")
    args = p.parse_args(argv)

    cfg = {}
    if args.config:
        with open(args.config, encoding="utf-8") as f:
            cfg = json.load(f)

    app = run(args.ticks, cfg, save=args.save)
    for line in report(app):
        print(line)


if __name__ == "__main__":
    main()
