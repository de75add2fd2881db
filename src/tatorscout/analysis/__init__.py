"""Analysis modules for robot traces.

Submodules are imported directly (``from tatorscout.analysis.movement import
analyze_movement``); ``kinematics`` is used by the trace layer itself.
"""
