"""Infrastructure layer — filesystem and git collaborators.

The core depends only on the :class:`~locus.infrastructure.filesystem.FileSystem`
and :class:`~locus.infrastructure.git.GitService` protocols.
"""
