"""StaffDesk package.

Feature modules (users, attendance, holidays, payroll, requests, tasks, reports)
each keep a model, a repository protocol with its MySQL implementation, a
service and a thin Flask controller.
"""
