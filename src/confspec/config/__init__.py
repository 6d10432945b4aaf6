"""Configuration layer — the tree being validated, file loading, and the
CLI's own settings and logging.
"""
