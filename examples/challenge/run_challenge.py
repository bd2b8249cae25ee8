"""
Headless pendulum challenge: session + frame loop driven by synthetic frames.

Flow:
  1. Build a SessionConfig (from --config JSON or command line values).
  2. Start the challenge and drive a FrameLoop with a jittered 60 fps ReplayScheduler.
  3. Print the HUD values once per simulated second and the final outcome/code.
  4. Optional: save angle and energy vs time (matplotlib).

Usage:
  python examples/challenge/run_challenge.py [--angle 45] [--damping 0.05] [--target 5] [--integrator rk4] [--plot]
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from pendulab import GamePhase, PendulumSession
from pendulab.config import ChallengeConfig, SessionConfig, SimulationParameters, load_session_config
from pendulab.core import TrajectoryHistory
from pendulab.io import FrameStream
from pendulab.physics import EulerIntegrator, MidpointIntegrator, RK4Integrator
from pendulab.simulation import FrameLoop, ReplayScheduler

INTEGRATORS = {"rk4": RK4Integrator, "midpoint": MidpointIntegrator, "euler": EulerIntegrator}


def build_config(args: argparse.Namespace) -> SessionConfig:
    if args.config:
        return load_session_config(args.config)
    return SessionConfig(
        parameters=SimulationParameters(
            length_m=args.length,
            initial_angle_deg=args.angle,
            damping=args.damping,
            gravity=args.gravity,
        ),
        challenge=ChallengeConfig(target_oscillations=args.target, time_limit_s=args.time_limit),
    )


def main():
    parser = argparse.ArgumentParser(description="pendulab: headless oscillation challenge")
    parser.add_argument("--config", type=Path, help="SessionConfig JSON file")
    parser.add_argument("--length", type=float, default=1.0)
    parser.add_argument("--angle", type=float, default=45.0, help="initial angle (degrees)")
    parser.add_argument("--damping", type=float, default=0.05)
    parser.add_argument("--gravity", type=float, default=9.8)
    parser.add_argument("--target", type=int, default=5)
    parser.add_argument("--time-limit", type=float, default=60.0)
    parser.add_argument("--seed", type=int, default=0, help="seed for frame jitter")
    parser.add_argument("--integrator", choices=sorted(INTEGRATORS), default="rk4")
    parser.add_argument("--plot", action="store_true", help="Save angle/energy plot")
    args = parser.parse_args()

    config = build_config(args)
    history = TrajectoryHistory()
    session = PendulumSession(config, history=history, integrator=INTEGRATORS[args.integrator]())

    n_frames = int(60 * (config.challenge.time_limit_s + 5))
    scheduler = ReplayScheduler(FrameStream.jittered(1.0 / 60.0, 0.004, n_frames, seed=args.seed))

    last_second = [-1]

    def on_frame(snap) -> None:
        if int(snap.t) != last_second[0]:
            last_second[0] = int(snap.t)
            print(
                f"t={snap.t:6.2f}s  theta={snap.theta_deg:7.2f} deg  omega={snap.omega:7.3f} rad/s  "
                f"oscillations={snap.oscillations}/{config.challenge.target_oscillations}  E={snap.energy:.4f} J"
            )
        if session.phase is GamePhase.FINISHED:
            loop.stop()

    loop = FrameLoop(session, scheduler, on_frame=on_frame)
    session.start()
    loop.start()
    scheduler.run()

    snap = session.snapshot()
    print(snap.message)
    print(f"  elapsed: {snap.elapsed:.2f}s, oscillations: {snap.oscillations}, code: {snap.code}")

    if args.plot:
        try:
            import matplotlib.pyplot as plt
        except ImportError:
            print("matplotlib not available, skip plot")
            return
        t = history.get("time")
        fig, (ax1, ax2) = plt.subplots(2, 1, sharex=True, figsize=(8, 6))
        ax1.plot(t, history.get("theta"), label="theta (rad)")
        ax1.axhline(0.0, color="gray", lw=0.5)
        ax1.set_ylabel("theta")
        ax1.legend()
        ax1.grid(True, alpha=0.3)
        ax2.plot(t, history.get("energy"), label="total energy (J)", color="C1")
        ax2.set_ylabel("E")
        ax2.set_xlabel("t (s)")
        ax2.legend()
        ax2.grid(True, alpha=0.3)
        fig.suptitle(f"Pendulum challenge: {snap.message}")
        fig.tight_layout()
        out = Path(__file__).resolve().parent / "challenge.png"
        fig.savefig(out, dpi=120)
        plt.close(fig)
        print(f"Saved {out}")


if __name__ == "__main__":
    main()
