"""Monochrome canvas, menus, elements and settings panel for the robot's small on-board display."""