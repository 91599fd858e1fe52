"""
Dashboard metrics: period windows, backend counts, deltas and growth charts.
"""
