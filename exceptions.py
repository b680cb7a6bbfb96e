"""
Error taxonomy for the back office.

Routers never see raw storage or ORM failures: services raise one of the
classes below and ``main.py`` maps each of them to an HTTP response.
"""


class BackofficeError(Exception):
     """Base exception for back office errors."""

     default_message = "An error occurred"

     def __init__(self, message=None, code=None, details=None):
          """Initialize the exception.

          Args:
               message: Error message
               code: Error code
               details: Additional error details
          """
          self.message = message or self.default_message
          self.code = code
          self.details = details
          super().__init__(self.message)

     def __str__(self):
          if self.code:
               return f"[{self.code}] {self.message}"
          return self.message

     def to_dict(self):
          """Convert the exception to a dictionary."""
          error_dict = {
               "error": self.__class__.__name__,
               "message": self.message,
          }

          if self.code:
               error_dict["code"] = self.code

          if self.details:
               error_dict["details"] = self.details

          return error_dict


class ValidationError(BackofficeError):
     """A field constraint was violated. ``errors`` maps field name to message."""

     default_message = "The given data was invalid"

     def __init__(self, errors=None, message=None, code=None):
          self.errors = dict(errors or {})
          super().__init__(message, code, self.errors)


class AuthorizationError(BackofficeError):
     """The acting user does not own the resource."""

     default_message = "You do not have access to this resource"


class NotFoundError(AuthorizationError):
     """The referenced id does not resolve, or resolves outside the caller's scope."""

     default_message = "Resource not found"


class StorageError(BackofficeError):
     """A blob or record write/delete failed."""

     default_message = "Storage operation failed"
