"""
Data models: review records and the assembled report.
"""
