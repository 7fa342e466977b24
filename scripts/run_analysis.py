# path: scripts/run_analysis.py
import argparse
import sys
import traceback

from beam_calc.services.logging_setup import setup_logging
logger = setup_logging()

def _excepthook(exctype, value, tb):
    msg = "".join(traceback.format_exception(exctype, value, tb))
    logger.error("Excepción no capturada:\n%s", msg)
    sys.__excepthook__(exctype, value, tb)

sys.excepthook = _excepthook

from beam_calc.domain.beam import Beam
from beam_calc.domain.loads import PointLoad, DistributedLoad
from beam_calc.domain.settings import AnalysisSettings
from beam_calc.domain.supports import Support, SupportKind
from beam_calc.engine.pipeline import analyze
from beam_calc.services.report import format_reactions, results_table
from beam_calc.view.renderer_vm import render_result


def main():
    ap = argparse.ArgumentParser(description="Viga simplemente apoyada de ejemplo: reacciones, V, M y flecha.")
    ap.add_argument("--length", type=float, default=10.0)
    ap.add_argument("--P", type=float, default=-50.0, help="carga puntual a mitad de luz (+ arriba)")
    ap.add_argument("--w", type=float, default=-5.0, help="distribuida uniforme (+ arriba)")
    ap.add_argument("--E", type=float, default=2e8)
    ap.add_argument("--I", type=float, default=1e-4)
    ap.add_argument("--resolution", type=int, default=100)
    ap.add_argument("--workers", type=int, default=1)
    ap.add_argument("--png", default="", help="guardar diagramas en este archivo")
    args = ap.parse_args()

    L = args.length
    beam = Beam.from_material(
        L, args.E, args.I,
        supports=[Support(0.0, SupportKind.PIN), Support(L, SupportKind.ROLLER)],
        point_loads=[PointLoad(0.5 * L, args.P)],
        dist_loads=[DistributedLoad(0.0, L, args.w, args.w)],
    )

    res = analyze(beam, args.resolution, AnalysisSettings(workers=args.workers))
    if not res.ok:
        logger.error("Sin resultados: %s", res)
        return 1

    print("\n".join(format_reactions(res.reactions)))
    for row in results_table(res, step=1.0):
        print(f"x={row.x:6.2f}  V={row.V:10.3f}  M={row.M:10.3f}  δ={row.deflection * 1000:9.3f} mm")

    if args.png:
        fig = render_result(res)
        fig.savefig(args.png, dpi=120)
        logger.info("Diagramas guardados en %s", args.png)
    return 0


if __name__ == "__main__":
    sys.exit(main())
