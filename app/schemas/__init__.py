"""Shared schemas"""
