#!/usr/bin/env python3
"""
Top-holder bubble map
Entry point: python -m holder_map.main holders
"""
from .cli import main

if __name__ == "__main__":
    main()
