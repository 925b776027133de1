"""
Game services for GridSnake.

Services orchestrate the domain entities: running a game, replaying a
stored one, switching screens, and rendering or exporting frames.
"""
