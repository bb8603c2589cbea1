"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), objets valeur et
exceptions. Cette couche n'a AUCUNE dépendance vers l'infrastructure
(adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entités métier (Service, Order, Voucher, Review, AdminUser)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Énumérations de statuts et catégories
"""
