"""FastAPI integration"""
