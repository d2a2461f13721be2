"""
Learning bounded context - Domain layer.

This context handles journey-based study:
- Progress events for flashcard sessions and quiz attempts
- Journey assignments and their lifecycle
- Invitation links for self-enrolment

Progress itself is never stored; it is derived from events on every read.
"""
