"""Addiscart API application"""
