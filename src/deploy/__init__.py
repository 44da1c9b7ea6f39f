"""
Deployment helpers.

- publisher: zips the project folder and uploads it to the hosting zip-deploy API
"""
