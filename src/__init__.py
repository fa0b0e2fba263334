"""
Review trend report: trend frequencies and developer flags from review exports.
"""
