"""
Core token engine: IR, expression language, resolution, and exporters.
"""
