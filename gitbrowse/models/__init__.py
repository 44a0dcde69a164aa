"""
Models module exports
"""
from gitbrowse.models.commit import GitCommit
from gitbrowse.models.commit_set import CommitSet, CommitSetState
from gitbrowse.models.oid import Oid
from gitbrowse.models.repo_data import RepoData
from gitbrowse.models.repository import Repository

__all__ = [
    'CommitSet',
    'CommitSetState',
    'GitCommit',
    'Oid',
    'RepoData',
    'Repository'
]
