"""
Run a single end-to-end architecture synthesis for a sample user and save the
full `SystemArchitecture` (plus a cascade and an optimization plan) to JSON.

Pass a JSON user-state document to analyze your own data; otherwise the
built-in sample below is used. Failures are written to an error log next to
the output.

Usage:
    python scripts/run_architecture_example.py [path/to/user_state.json]
"""
import os
import sys
import json
import logging

from life_systems.core.config import AppConfig
from life_systems.core.types import UserSystemsState, SystemType, DIRECTION_IMPROVEMENT
from life_systems.orchestration.architecture_orchestrator import ArchitectureOrchestrator
from life_systems.prompts.narrative_context import build_narrative_inputs

OUT_DIR = AppConfig.report.output_dir
OUT_PATH = os.path.join(OUT_DIR, "architecture_run.json")
ERR_PATH = os.path.join(OUT_DIR, "architecture_run_error.log")

# Sample user: run-down vitality, solid everywhere else, two systems never recorded
SAMPLE_STATE = {
    "user_id": "sample-user",
    "records": {
        "vitality": {
            "satisfaction_level": 3,
            "key_metrics": {"Sleep Optimization": 2.5, "Physical Fitness": 3},
            "interventions": [
                {"name": "Start a fixed bedtime", "implementation_status": "planned"},
                {"name": "Add a 20 minute walk", "implementation_status": "planned"},
            ],
        },
        "resources": {"satisfaction_level": 8},
        "connection": {"satisfaction_level": 8},
        "development": {
            "satisfaction_level": 8,
            "interventions": [{"name": "Improve deliberate practice", "implementation_status": "planned"}],
        },
    },
    "patterns": [
        {
            "description": "Late nights erode next-day focus",
            "impact_areas": ["vitality", "development"],
            "transformation_potential": 0.7,
        },
    ],
    "prior_scores": {"vitality": 4.5, "development": 7},
}


def load_state(argv):
    if len(argv) > 1:
        with open(argv[1]) as f:
            return UserSystemsState.from_dict(json.load(f))
    return UserSystemsState.from_dict(SAMPLE_STATE)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    os.makedirs(OUT_DIR, exist_ok=True)
    try:
        state = load_state(sys.argv)
        orchestrator = ArchitectureOrchestrator()
        architecture = orchestrator.synthesize(state)
        focus = architecture.monitoring.recommended_focus or SystemType.VITALITY
        cascade = orchestrator.cascade(focus, DIRECTION_IMPROVEMENT, user_state=state)
        plan = orchestrator.generate_optimization_plan(state)

        output = {
            "architecture": orchestrator.to_report(architecture),
            "cascade": cascade.to_dict(),
            "optimization_plan": plan.to_dict(),
            "narrative_inputs": build_narrative_inputs(architecture, cascade),
        }
        with open(OUT_PATH, "w") as f:
            json.dump(output, f, indent=AppConfig.report.indent)

        print(f"Saved run output to {OUT_PATH}")
    except Exception as e:
        print("Run failed:", e)
        with open(ERR_PATH, "w") as ef:
            ef.write(str(e))
        print(f"Wrote error to {ERR_PATH}")
        sys.exit(1)


if __name__ == "__main__":
    main()
