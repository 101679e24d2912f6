"""
Comic Planner
Turns one free-text story prompt into a multi-chapter comic plan.
"""

__version__ = "0.1.0"
