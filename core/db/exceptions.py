"""
Custom Database Exceptions for DevConnect

This module provides custom exception classes for database operations:
- ConcurrentModificationError: Raised when a status-guarded update matches no row

Workflow transitions are written as ``filter(pk=..., status=expected).update(...)``.
When another request changed the row first, the update affects zero rows and
this exception is raised so the surrounding transaction rolls back.
"""


class ConcurrentModificationError(Exception):
    """
    Exception raised when a guarded update detects a concurrent modification.

    Attributes:
        model_name: The name of the model class.
        object_id: The primary key (or uuid) of the object.
        expected_status: The status the update was guarded on.
        actual_status: The status found in the database, if known.

    Example:
        updated = Project.objects.filter(pk=pk, status='open').update(...)
        if updated != 1:
            raise ConcurrentModificationError('Project', pk, expected_status='open')
    """

    def __init__(
        self,
        model_name: str = None,
        object_id=None,
        expected_status: str = None,
        actual_status: str = None,
        message: str = None
    ):
        self.model_name = model_name
        self.object_id = object_id
        self.expected_status = expected_status
        self.actual_status = actual_status

        if message:
            self.message = message
        else:
            self.message = (
                f"Concurrent modification detected for {model_name} "
                f"(id={object_id}). Expected status '{expected_status}'"
            )
            if actual_status:
                self.message += f", but found '{actual_status}'"
            self.message += ". The record was modified by another request."

        super().__init__(self.message)

    def __str__(self):
        return self.message
