"""Cloudlet bootstrap: one-shot provisioning for freshly booted instances.

Core design goals:
- Runs once per machine (marker file), facts refreshed on every run
- OS detected once and passed to every step
- Steps run in order and stop at the first failure
- Centralized logging
"""

__all__ = []
