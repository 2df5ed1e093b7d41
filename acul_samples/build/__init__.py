"""
Versioned bundle builds of the stored samples.
"""
