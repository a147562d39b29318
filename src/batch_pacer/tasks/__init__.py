"""
Task subsystem.

Components:
- task_models.py: data structures (WorkItem, TaskStatus, Subscription)
- task_scheduler.py: bounded-concurrency Scheduler
- waiting.py: wait_until() polling helper
"""
