"""Outbound HTTP transport"""
