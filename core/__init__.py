"""Shared configuration, exceptions and logging setup."""
