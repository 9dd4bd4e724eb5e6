"""
Interfaces layer package.

Contains FastAPI routers, the shop controller, input structs and the
page renderer. No business logic belongs here.
Routes call the controller and render the directive it returns.
"""
