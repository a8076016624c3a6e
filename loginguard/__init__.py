"""loginguard: login controller with failure tracking, timed lockout and connectivity gating."""

__version__ = "0.1.0"
