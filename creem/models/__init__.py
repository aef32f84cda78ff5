"""Pydantic models for webhook envelopes and handler payloads"""
