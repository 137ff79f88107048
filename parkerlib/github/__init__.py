"""A small GitHub REST API client, its models and errors, and repository enumeration."""