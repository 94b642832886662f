"""Collaborator implementations: stores and remote suggestion clients."""
