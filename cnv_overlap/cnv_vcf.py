import pysam
from collections import OrderedDict
from cnv_overlap.cnv import AMPLIFICATION, DELETION, Cnv
from cnv_overlap.logger import logger
from cnv_overlap.region_set import RegionSet

vcf_extensions = ('.vcf', '.vcf.gz', '.vcf.bgz', '.bcf')
sv_states = {'DEL': DELETION, 'DUP': AMPLIFICATION, 'INS': AMPLIFICATION}


def is_vcf(path):
    return path.endswith(vcf_extensions)


def cnv_state_from_record(record, sample, ploidy=2):
    '''
    Return AMPLIFICATION, DELETION or None (no CNV) for a sample's call
    in a pysam VariantRecord.
    '''
    if 'SVTYPE' not in record.info:
        return None
    if record.info['SVTYPE'] == 'CNV':
        copy_number = record.samples[sample].get('CN')
        if copy_number is None:
            return None
        if copy_number < ploidy:
            return DELETION
        elif copy_number > ploidy:
            return AMPLIFICATION
        return None
    if record.info['SVTYPE'] not in sv_states:
        return None
    if record.alts is not None and len(record.alts) > 1:
        raise ValueError("Variants must be biallelic but the variant " +
                         "{}:{}-{}/{}".format(record.chrom,
                                              record.pos,
                                              record.ref,
                                              ",".join(record.alts)) +
                         " has {} ALT alleles".format(len(record.alts)))
    gt = record.samples[sample].get('GT')
    if gt is not None and 1 in gt:
        return sv_states[record.info['SVTYPE']]
    return None


def read_vcf(vcf, ploidy=2, pass_filters=False, minimum_length=0,
             samples=None):
    '''
    Read CNV calls from a VCF/BCF into one RegionSet per sample.

    Intervals run from POS to END inclusive. For symbolic alleles such
    as <DEL> or <CNV> POS is the padding base before the event, so each
    call includes that one extra base.

    Args:
        vcf:    path to VCF/BCF file.

        ploidy: expected copy number. Copy numbers above this are
                amplifications and copy numbers below are deletions.

        pass_filters:
                Only include variants with PASS in the FILTER field.

        minimum_length:
                Ignore variants shorter than this value.

        samples:
                Optional list of samples to read. Defaults to all
                samples in the VCF.
    '''
    with pysam.VariantFile(vcf) as vf:
        vcf_samples = list(vf.header.samples)
        if samples is None:
            samples = vcf_samples
        else:
            missing = [x for x in samples if x not in vcf_samples]
            if missing:
                raise ValueError("Samples not found in VCF {}: {}".format(
                    vcf, ", ".join(missing)))
        if not samples:
            raise ValueError("No samples found in VCF {}".format(vcf))
        regions = OrderedDict((s, []) for s in samples)
        n = 0
        for record in vf:
            if pass_filters and 'PASS' not in record.filter:
                continue
            # pysam start is 0-based, stop is the 1-based END
            if record.stop - record.start < max(minimum_length, 1):
                continue
            n += 1
            for s in samples:
                state = cnv_state_from_record(record, s, ploidy)
                if state is not None:
                    regions[s].append(Cnv(chrom=record.chrom,
                                          start=record.start + 1,
                                          stop=record.stop,
                                          state=state))
    logger.info("Read {:,} records for {:,} sample(s) from {}".format(
        n, len(samples), vcf))
    return OrderedDict((k, RegionSet(v, name=k)) for k, v in regions.items())
