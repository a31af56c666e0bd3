from .polarizability import polarizability, PI_table, CONVERGENCE_THRESHOLD, MU_STEP
