"""Memo pad with a shared-store home-screen widget."""
