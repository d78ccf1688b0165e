"""Shared pipeline plumbing: context, error taxonomy, import/export orchestration."""
