"""Attendance Import package.

Bulk ingestion of attendance rows (spreadsheet exports, device feeds) organised
by feature modules (employees, ingest, workers) with a thin Flask controller
layer on top of service/repository layers.
"""
