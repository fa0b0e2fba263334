"""
Utility modules for the trend report.

Cross-cutting concerns:
- Trends: Tokenizing multi-value trend fields
- Console: Interactive prompts and flag confirmation
- Storage: Writing rendered reports and metadata
"""
