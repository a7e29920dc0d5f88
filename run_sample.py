#!/usr/bin/env python3
"""
Azure AI Foundry — Getting-Started Samples
==========================================
Thin entry-point. All logic lives in foundry_samples.runner.cli.

Usage:
    python3 run_sample.py agent                      # simple agent conversation
    python3 run_sample.py file-search                # file search over assets/documents
    python3 run_sample.py chat                       # one chat completion
    python3 run_sample.py langchain                  # LangChain model with project tools
    python3 run_sample.py connections                # list project connections
    python3 run_sample.py deployments --name gpt-4o  # show one deployment
    python3 run_sample.py sweep                      # clean up after crashed sessions
"""

from foundry_samples.runner.cli import main

if __name__ == "__main__":
    main()
