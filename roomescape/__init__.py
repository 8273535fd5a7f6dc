"""
Room escape reservation waiting queue
"""
