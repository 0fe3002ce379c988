"""
tasks — per-user task management.

Every read and write is scoped by the owning user; a task that belongs to
someone else is indistinguishable from one that does not exist.
"""
