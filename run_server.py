#!/usr/bin/env python3
"""
Convenience script to run LightAI.

    python run_server.py            # HTTP server
    python run_server.py --cli      # interactive REPL
    python run_server.py --port 8080
"""
import sys

from lightai.cli import main

if __name__ == "__main__":
    sys.exit(main())
