#!/usr/bin/env python3
"""
GA Scheduler CLI - Minimal entry point.

Assigns tasks to developers under precedence, skill, deadline and capacity
constraints using a genetic algorithm.

Usage:
    python3 ga_cli.py tasks.json devs.json
    python3 ga_cli.py tasks.json devs.json --seed 42 --plot --output results/
    python3 ga_cli.py --run run_config.yaml
    python3 ga_cli.py --help

Writes schedule.json and log.json to the output directory.
"""

import sys
from pathlib import Path

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


if __name__ == '__main__':
    from ga_sched.cli import main
    sys.exit(main())
