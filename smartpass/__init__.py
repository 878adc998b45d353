"""SmartPass: employee and ID-card management API"""
