"""
API v1 路由包

包含所有 v1 版本的 API 路由。
"""
