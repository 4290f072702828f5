"""
Service layer: dataset store and CSV ingestion.
"""
