"""Field errors, CIDR checks and validators for provider, shoot, cloud profile and secret settings."""