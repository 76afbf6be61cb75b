"""Benchmark orchestration.

Builds benchmark players for a target platform or starts an interactive
run of one scene or the whole suite. Results are written by the player to
the configured results directory and picked up by the viewer.
"""
