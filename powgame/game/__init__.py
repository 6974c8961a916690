"""
Game administration, auction model and clients
"""
