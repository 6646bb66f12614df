"""
Command Line Interface Package

Command Structure:
- txsummary process FILE: one-shot processing, non-zero exit on failure
- txsummary watch [DIRECTORY]: continuous mode until interrupted
- txsummary summarize FILE: dry run, prints the summary only
- txsummary version / config: utility commands
"""
