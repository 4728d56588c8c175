"""
Learning Paths

Reconciles progress rows with completion records and derives module
status, locking and recommendations. Exposed through the students router.
"""
