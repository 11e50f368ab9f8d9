"""
Customers screen.

- Customer list with search, sort by name/email/phone, list/card layouts
- Session-local delete; view/update hand off to the external router
- Add customer form posting to the backend
"""
