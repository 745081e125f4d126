"""Legacy platform migration scripts (run with python -m scouting.scripts.<name>)."""
