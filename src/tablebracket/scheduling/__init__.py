from tablebracket.scheduling.scheduler import Assignment, MatchScheduler, Selection

__all__ = ["Assignment", "MatchScheduler", "Selection"]
