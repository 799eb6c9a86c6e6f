"""gitpolicy: check a repository's git workflow against its contributor policy."""

__version__ = "0.1.0"
