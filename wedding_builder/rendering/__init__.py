"""
Page rendering for public wedding sites
"""
