#!/usr/bin/env python
"""
Gradient Wash CLI - Tint an animated GIF with a color gradient over time

Usage:
    python main.py [options] <input> <output>

Examples:
    python main.py cat.gif cat_rainbow.gif                   # Default rainbow
    python main.py --gradient ff0000,0000ff cat.gif out.gif  # Custom gradient
    python main.py --loop_count 3 --threads 4 cat.gif out.gif
"""

import sys

from gradient_wash.cli import main


if __name__ == '__main__':
    sys.exit(main())
