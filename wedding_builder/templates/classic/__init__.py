"""
Classic Elegance template versions
"""
