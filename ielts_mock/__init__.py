"""IELTS mock writing practice service."""
