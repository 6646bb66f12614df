"""
Test Suite for txsummary

Test Structure:
- fixtures/: CSV file builders and reference rows
- unit/: Unit tests mirroring src/ package structure
- integration/: CLI commands through Click's runner
- e2e/: CLI invoked in a subprocess

Test Categories:
- Core (money, dates, parser, aggregation, config)
- Ingestion and directory watching
- SQL persistence
- Email rendering and SMTP delivery
- Processing pipeline

Test Data:
All transaction files are synthetic and written to temporary directories.
No test reaches a real SMTP server or database.
"""
