"""
cell_sim module: render/colors.py

Central color palette.
"""

import config

BG = config.BG_COLOR
DIR = (30, 40, 40)
TEXT = (20, 30, 25)

CELL = (70, 110, 200)
CELL_FOCUSED = (230, 120, 40)
CELL_BEST = (200, 60, 160)
CELL_USER = (240, 200, 40)
FOOD = (200, 40, 40)
BULLET = (120, 80, 40)
