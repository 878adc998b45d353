"""Feature routers (one per resource group)"""
