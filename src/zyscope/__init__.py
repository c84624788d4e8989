"""Zyscope: gamified travel exploration backend."""
