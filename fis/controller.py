"""
Orchestrates the fuzzy inference pipeline.

This module ties the rule engine, the implication/aggregation step and the
centroid defuzzifier together behind one object that owns an immutable
InferenceSystem. It validates inputs before evaluation and decides what to
return when no rule fires.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from fis.config_loader import build_system
from fis.definition import InferenceSystem, validate_inputs
from fis.defuzzifier import defuzzify
from fis.errors import EmptyFiringError
from utils.logger import set_eval_index

controller_log = logging.getLogger("controller")


class FISController:
    """
    The main Mamdani inference controller.

    Attributes:
        system (InferenceSystem): The definition being evaluated.
        output (Optional[str]): Default output variable for ``compute``.
        fallback (Optional[float]): Value returned when no rule fires. With
            None, EmptyFiringError propagates to the caller.
    """

    def __init__(
        self,
        system: InferenceSystem,
        output: Optional[str] = None,
        fallback: Optional[float] = None,
    ):
        self.system = system
        outputs = system.output_variables()
        if output is None and len(outputs) == 1:
            output = outputs[0]
        if output is not None:
            # fail on an unknown output now rather than on the first call
            system.variable(output)
        self.output = output
        self.fallback = fallback
        controller_log.info(
            "FIS Controller initialized: inputs=%s outputs=%s, %d rules.",
            list(system.input_variables()),
            list(outputs),
            len(system.rules),
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "FISController":
        """
        Builds a controller from a parsed TOML definition.

        The optional ``[controller]`` table may set ``output`` and ``fallback``.
        """
        ctrl_cfg = config.get("controller", {})
        fallback = ctrl_cfg.get("fallback")
        return cls(
            build_system(config),
            output=ctrl_cfg.get("output"),
            fallback=float(fallback) if fallback is not None else None,
        )

    def compute(self, inputs: Mapping[str, float], output: Optional[str] = None) -> float:
        """
        Executes one full inference for a set of crisp inputs.

        Args:
            inputs (Mapping[str, float]): Crisp value per input variable.
            output (Optional[str]): Output variable; defaults to ``self.output``.

        Returns:
            float: The defuzzified output, or the fallback when no rule fires
                and a fallback is configured.
        """
        output = output or self.output
        if output is None:
            raise ValueError(
                "No output variable given and the system has "
                f"{len(self.system.output_variables())} outputs"
            )
        validate_inputs(self.system, inputs)

        controller_log.debug("--- FIS Cycle Start (%s) ---", dict(inputs))
        try:
            result = defuzzify(self.system, inputs, output)
        except EmptyFiringError:
            if self.fallback is None:
                raise
            controller_log.warning(
                "No rule fired for '%s'. Outputting fallback %.4f.", output, self.fallback
            )
            result = self.fallback
        controller_log.debug("--- FIS Cycle End (%s= %.4f) ---", output, result)
        return result

    def compute_all(self, inputs: Mapping[str, float]) -> Dict[str, float]:
        """Defuzzifies every variable targeted by a rule consequent."""
        return {
            name: self.compute(inputs, name) for name in self.system.output_variables()
        }

    def score_batch(
        self, rows: Iterable[Mapping[str, float]], output: Optional[str] = None
    ) -> List[float]:
        """
        Computes the output for each input row, in order.

        Rows are independent; the system is read-only. Log records emitted
        while scoring row i carry i as their evaluation index.
        """
        results = []
        try:
            for i, row in enumerate(rows):
                set_eval_index(i)
                results.append(self.compute(row, output))
        finally:
            set_eval_index(-1)
        controller_log.info("Scored %d rows.", len(results))
        return results
