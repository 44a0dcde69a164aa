"""
Git commit model class
"""
from datetime import datetime, timedelta, timezone


class GitCommit:
    """Commit metadata shown by the commit view"""

    def __init__(self, commit_id, author, when, summary, author_email='', parents=None):
        """
        Initialize a new GitCommit object.

        Args:
            commit_id (str): Full commit hash
            author (str): Author name
            when (datetime): Author time, timezone aware
            summary (str): First line of the commit message
            author_email (str, optional): Author e-mail
            parents (list, optional): Parent commit hashes
        """
        self.id = commit_id
        self.short_id = commit_id[:7]
        self.author = author
        self.author_email = author_email
        self.when = when
        self.summary = summary
        self.parents = list(parents or [])

    @classmethod
    def from_pygit2(cls, pygit_commit):
        """Build from a pygit2.Commit"""
        signature = pygit_commit.author
        tz = timezone(timedelta(minutes=signature.offset))
        return cls(
            str(pygit_commit.id),
            signature.name,
            datetime.fromtimestamp(signature.time, tz),
            pygit_commit.message.split('\n', 1)[0],
            signature.email,
            [str(parent_id) for parent_id in pygit_commit.parent_ids])

    def format_row(self, date_format='%Y-%m-%d %H:%M:%S %z', author_width=None):
        """Row text as shown in the commit list"""
        author = self.author
        if author_width:
            author = author[:author_width].ljust(author_width)
        return f" {self.when.strftime(date_format)} {author} {self.summary}"

    def __str__(self):
        return f"{self.short_id} - {self.summary}"

    def __repr__(self):
        return f"GitCommit('{self.short_id}', '{self.summary}')"
