"""API Package"""
