"""
Sleek executable handling: versions, probing, selection and formatting.
"""
