"""Service layer — operations behind the CLI.

Every service method returns a :class:`~confspec.services.result.ServiceResult`.
"""
