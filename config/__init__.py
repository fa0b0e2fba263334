"""
Configuration for the review trend report.
"""
