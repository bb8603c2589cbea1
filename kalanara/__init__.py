"""
Kalanara - Boutique et back-office de vouchers pour soins de spa.

Ce package permet de vendre des soins sous forme de vouchers (paiement
Midtrans), de vérifier et d'utiliser ces vouchers à l'accueil du spa, et de
gérer le catalogue, les commandes et les avis depuis un back-office.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur, erreurs)
- services/ : Couche application (cas d'utilisation, orchestration)
- adapters/ : Clients externes (Midtrans, Resend)
- infrastructure/ : Persistance SQLModel
- web/ : API FastAPI
"""

__version__ = "0.1.0"
