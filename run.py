#!/usr/bin/env python3
"""
CLI entry point for the Guest Registration service.
"""
from src.main import main

if __name__ == "__main__":
    main()
