"""
Fonctions utilitaires partagees dans le projet Kalanara.

- clock : horloge UTC naive et arithmetique de mois
- constants : alphabet des codes, coordonnees du spa
- formatting : telephone, montant, date, message WhatsApp
"""
