"""Database migrations for the Postgres registry backend"""
