"""Shared utilities: exceptions, logging, key casing and parameter validation"""
