"""
Core do railpipe.

Reúne a implementação canônica do engine de pipelines lineares:

    - core.pipeline → tipos, estado, definições e registry
    - core.engine   → executor, dispatcher de hooks e runner
    - core.config   → configuração declarativa (YAML/JSON)
    - errors / exceptions → payloads de erro e exceções tipadas

O core é determinístico na fase síncrona, testável isoladamente e livre
de estado global além do supervisor de hooks e do registry padrão.
"""
