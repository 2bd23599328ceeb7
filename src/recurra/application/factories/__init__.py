"""Application factories for repository access."""

from recurra.application.factories.repository_factory import RepositoryFactory

__all__ = ["RepositoryFactory"]
