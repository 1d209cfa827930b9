"""
Domain stores for the booking platform.

Each store owns the collections of one entity family and exposes its
actions and derived getters. Stores are created by the Application; this
package never instantiates them at import time.
"""
