"""
Core building blocks shared by services and endpoints: settings,
logging, errors, the entity store, status machines and security.
"""
