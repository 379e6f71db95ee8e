"""
Classification engine.

Components:
- models.py: value types (TaskInput, ScoreResult, Quadrant, Classification, TaskRecord)
- scoring.py: urgency/importance heuristics
- decide.py: quadrant rules + borderline detection
- badges.py: badges and the bounded reasoning string
- sanitize.py: redaction before text leaves the process
- pipeline.py: heuristic classification + optional refinement
- board.py: column grouping/ordering and manual record updates
- legacy.py: import from the old JSON storage format
"""
