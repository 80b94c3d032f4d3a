"""
Test cases for the 1D heat storage solver.

Run tests with pytest:
    pytest heatstore/tests/ -v

Or run individual test files:
    pytest heatstore/tests/test_solver.py -v
    pytest heatstore/tests/test_convergence.py -v
"""
