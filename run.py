"""
Entry Point Script (Bootstrap)
==============================
Development runner that works without installing the package.

It sits outside 'src' and puts that directory on 'sys.path' so that
'from drillblock.model...' resolves.

Usage:
    $ python run.py
    $ python run.py --batch "3,2,5" --obj blocks.obj
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from drillblock.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
