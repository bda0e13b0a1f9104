"""
Adaptateurs pour les fournisseurs IA (OpenAI, OpenRouter, Azure OpenAI).

Modules :
- retry : retry transport et retry d'operation avec backoff exponentiel
- prompts : construction des prompts et parsing des reponses
- base_client : contrat de completion commun
- openai_client, openrouter_client, azure_openai_client : variantes
- factory : selection du client selon la configuration
"""
