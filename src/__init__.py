"""Application Layer.

Infrastructure and application services that orchestrate domain logic.
This layer handles I/O and the command line, and coordinates domain operations.
"""
