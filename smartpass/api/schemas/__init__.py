"""HTTP request/response schemas"""
