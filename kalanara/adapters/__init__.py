"""
Couche adaptateurs.

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- api/ : Retry HTTP partagé
- payment/ : Passerelle de paiement Midtrans Snap
- email/ : Envoi d'e-mails via Resend

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""
