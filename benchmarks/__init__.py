"""Performance benchmarks for cflode.

This package contains microbenchmarks for the time-stepping hot path:
single-field and coupled-subsystem TVD-RK3 integration.
"""
