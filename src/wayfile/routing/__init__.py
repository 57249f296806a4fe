"""Routing — compiled route table with constraint-aware matching.

Routes are registered during setup and compiled into an immutable
lookup structure.  Parameters may carry named constraints such as
``file`` and ``nonfile``.
"""
