"""This is the processing submodule.

This module contains the stages that turn raw log lines into rest statistics:
record parsing, chronological ordering, interval reconstruction and the
minute-of-hour aggregation queries.
"""
