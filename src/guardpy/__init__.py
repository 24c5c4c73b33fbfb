"""Reconstruct guard duty and rest intervals from security logs."""
