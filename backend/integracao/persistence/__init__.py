"""Camada de persistência: repositórios psycopg2 e mapeamento linha/modelo."""
