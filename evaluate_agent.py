#!/usr/bin/env python3
"""
Azure AI Foundry — Agent Evaluation Sample
==========================================
Thin entry-point. All logic lives in foundry_samples.evaluator.

Modes:
  Demo:          python3 evaluate_agent.py
  Existing run:  python3 evaluate_agent.py --thread <thread_id> --run <run_id>
  Evaluators:    python3 evaluate_agent.py -e relevance,violence -o raw.json
"""

from foundry_samples.evaluator.cli import main

if __name__ == "__main__":
    main()
