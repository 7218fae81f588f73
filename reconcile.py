"""Command line entry point: python reconcile.py --statement bank.csv --transactions records.csv"""

from statement_recon.reconcile import main

if __name__ == '__main__':
    raise SystemExit(main())
