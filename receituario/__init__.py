"""Prescription numbering and record-keeping service."""
