"""Stack Purge - dependency-ordered teardown of provisioned stacks."""

__version__ = "0.1.0"
