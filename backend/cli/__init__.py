"""
Command line tools for GridSnake.
"""
