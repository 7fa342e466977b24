from __future__ import annotations

import logging
from typing import Optional, Union

from beam_calc.domain.beam import Beam
from beam_calc.domain.results import (
    AnalysisError, AnalysisFailure, AnalysisResult, Diagram,
)
from beam_calc.domain.settings import AnalysisSettings, DEFAULT_SETTINGS
from beam_calc.engine.deflection import deflect
from beam_calc.engine.diagrams import build_V_M_case
from beam_calc.engine.equilibrium import solve_case
from beam_calc.engine.normalize import validate_beam
from beam_calc.engine.unit_load import unit_load_moments

logger = logging.getLogger(__name__)


def _run(beam: Beam, resolution: int, settings: AnalysisSettings) -> AnalysisResult:
    case = validate_beam(beam, resolution, tol=settings.position_tol)

    # 1) Equilibrio
    reactions = solve_case(case, settings)

    # 2) V(x), M(x) con cargas reales
    x, V, M = build_V_M_case(case, reactions, tol=settings.position_tol).sample(resolution)

    # 3) Momentos de carga unitaria (mismos apoyos)
    m = unit_load_moments(beam.supports, case.length, resolution, settings)

    # 4) Flecha
    delta = deflect(x, M, m, case.length, beam.EI)

    return AnalysisResult(
        reactions=reactions,
        shear=Diagram(x=x, values=V),
        bending_moment=Diagram(x=x, values=M),
        deflection=Diagram(x=x, values=delta),
        notes=reactions.notes,
    )


def analyze(
    beam: Beam,
    resolution: Optional[int] = None,
    settings: Optional[AnalysisSettings] = None,
) -> Union[AnalysisResult, AnalysisFailure]:
    """
    Pipeline completo: equilibrio -> V/M -> carga unitaria -> flecha.

    Función pura: cada llamada recalcula todo desde cero.
    Si la entrada no tiene solución devuelve AnalysisFailure (kind + mensaje);
    la UI debe limpiar los diagramas en ese caso.
    """
    settings = settings or DEFAULT_SETTINGS
    if resolution is None:
        resolution = settings.resolution

    try:
        result = _run(beam, resolution, settings)
    except AnalysisError as exc:
        logger.warning("Análisis fallido (%s): %s", exc.kind.value, exc.message)
        return exc.to_failure()

    _, (x_min, d_min) = result.deflection.extrema()
    logger.debug(
        "Análisis OK: L=%g, n=%d, |M|max=%g, flecha min=%g en x=%g",
        beam.length, resolution, result.bending_moment.abs_max, d_min, x_min,
    )
    return result
