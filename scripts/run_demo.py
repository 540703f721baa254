#!/usr/bin/env python3
"""
Demo runner
Recreates the vector index, loads the sample corpus and prints the nearest
neighbours of the query sentence. Configuration comes from the environment
(see .env.example).
"""

import sys
from pathlib import Path

# Allow running from a source checkout without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from redisknn.core.demo import main

if __name__ == "__main__":
    sys.exit(main())
