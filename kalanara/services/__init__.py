"""
Couche services (cas d'usage).

Les services orchestrent les regles metier : emission et utilisation des
vouchers, checkout et confirmation de paiement, livraison, catalogue,
avis, comptes admin et tableau de bord.

Ils dependent des ports definis dans core/, jamais directement des
implementations SQLModel ou HTTP.
"""
