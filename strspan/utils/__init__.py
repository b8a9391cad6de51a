"""Peripheral text helpers."""
