"""
Pipeline components for the trend report.

Contains the modules that turn an export into a report:
- Ingestion (export loading and period windowing)
- Aggregation (trend frequency counting)
- Flagging (developers needing follow-up)
- Assembly (report composition)
- Rendering (plain-text report)
"""
